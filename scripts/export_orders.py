"""Download the dashboard's filtered orders CSV to a local file."""

import argparse
import os

import httpx


def main() -> None:
    """CLI entrypoint for scripted order exports."""

    parser = argparse.ArgumentParser(description="Export orders CSV from the dashboard API.")
    parser.add_argument("--dashboard-url", default="http://localhost:8010")
    parser.add_argument("--api-key", default=os.getenv("API_KEY", "dev-secret"))
    parser.add_argument("--search", default="")
    parser.add_argument("--status", default="all")
    parser.add_argument("--sort-by", default="created_at")
    parser.add_argument("--sort-dir", default="desc")
    parser.add_argument("--refresh", action="store_true", help="Re-fetch the orders window first")
    parser.add_argument("--output", default=None, help="Defaults to the server-suggested filename")
    args = parser.parse_args()

    headers = {"x-api-key": args.api_key}
    with httpx.Client(base_url=args.dashboard_url, headers=headers, timeout=10.0) as client:
        if args.refresh:
            client.post("/orders/refresh").raise_for_status()
        resp = client.get(
            "/orders/export",
            params={
                "search": args.search,
                "status": args.status,
                "sort_by": args.sort_by,
                "sort_dir": args.sort_dir,
            },
        )
        resp.raise_for_status()

    output = args.output
    if output is None:
        disposition = resp.headers.get("content-disposition", "")
        output = disposition.partition("filename=")[2] or "orders.csv"
    with open(output, "w", encoding="utf-8") as fp:
        fp.write(resp.text)
    print(f"wrote {output}")


if __name__ == "__main__":
    main()
