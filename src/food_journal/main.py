"""Command-line entrypoint that serves the journal API locally."""

import uvicorn

from food_journal.api.app import create_app
from food_journal.containers import build_container


def main() -> None:
    """Serve the API on the configured host and port."""
    container = build_container()
    uvicorn.run(
        create_app(container),
        host=container.settings.host,
        port=container.settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
