"""Entry point for the PyQt GUI client."""
import sys

from .gui.windows import ChatApplication


def main() -> int:
    app = ChatApplication()
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
