"""Main entry point for the interaction agent."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from rumcore.api import create_fastapi_app
from rumcore.app import Application
from rumcore.config import AgentConfig
from rumcore.logging_config import setup_logging


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    config = AgentConfig.from_env()
    app = create_fastapi_app(Application(config))

    uvicorn.run(
        app,
        host=config.api_host,
        port=config.api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
