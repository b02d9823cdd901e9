import os

from . import create_app


def main() -> None:
    port = int(os.getenv("PORT", "8080"))
    application = create_app()
    application.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
