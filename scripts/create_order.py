"""Create one payment order through the proxy and print the response."""

import argparse
import json
from uuid import uuid4

import httpx


def main() -> None:
    """CLI entrypoint for manual proxy checks."""

    parser = argparse.ArgumentParser(description="POST a payment order to the proxy.")
    parser.add_argument("--proxy-url", default="http://localhost:8020")
    parser.add_argument("--amount", type=int, required=True, help="Smallest currency unit, e.g. paise")
    parser.add_argument("--currency", default="INR")
    parser.add_argument("--receipt", default=None)
    parser.add_argument("--note", action="append", default=[], help="key=value, repeatable")
    parser.add_argument("--manual-capture", action="store_true")
    args = parser.parse_args()

    payload = {
        "amount": args.amount,
        "currency": args.currency,
        "receipt": args.receipt or f"rcpt_{uuid4().hex[:12]}",
        "notes": dict(note.split("=", 1) for note in args.note),
    }
    if args.manual_capture:
        payload["payment_capture"] = 0

    resp = httpx.post(
        f"{args.proxy_url}/create_razorpay_order",
        json=payload,
        headers={"x-correlation-id": str(uuid4())},
        timeout=15.0,
    )
    print(resp.status_code)
    print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
