"""Simple entrypoint to open the YourFit wardrobe locally."""

import json

from yourfit_app.app import WardrobeApp


def main() -> None:
    app = WardrobeApp()
    print(json.dumps(app.snapshot(), indent=2))


if __name__ == "__main__":
    main()
