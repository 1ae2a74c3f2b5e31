"""Run the dashboard API with uvicorn: python -m streamdash."""

import argparse

import uvicorn

from streamdash.adapters.frameworks.fastapi import create_dashboard_app
from streamdash.config import SessionConfig, configure_logging


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Video analytics dashboard API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    configure_logging(args.log_level.upper())
    app = create_dashboard_app(SessionConfig.from_env())
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
