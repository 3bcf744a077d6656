"""Simple entrypoint to run the Travel Stylist pipeline locally."""

import argparse
import asyncio
import json

from stylist_app.app import TravelStylistApp


def main() -> None:
    parser = argparse.ArgumentParser(description="Turn a trip or event request into outfit recommendations.")
    parser.add_argument("message", nargs="?", default="I'm going to Tokyo next week")
    parser.add_argument("--gender", choices=["male", "female", "any"], default=None)
    parser.add_argument("--user", default="local")
    args = parser.parse_args()

    app = TravelStylistApp()
    session = app.session(args.user)
    if args.gender:
        session.set_gender(args.gender)
    plan = asyncio.run(session.submit(args.message))
    print(json.dumps(plan.to_dict() if plan else None, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
