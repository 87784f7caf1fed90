"""Main application entry point for Habitica MCP server.

This module contains the CoreServer class which serves as the main application runner
for the FastMCP server implementation.

Exit Codes:
    0: Normal successful termination
    1: Configuration-related failures (missing Habitica credentials, TOML parse errors,
       validation failures, missing required files, unknown configuration keys, or
       unhandled exceptions)

Configuration failures that result in exit code 1:
    - HABITICA_USER_ID or HABITICA_API_TOKEN not provided by any source
    - Invalid TOML syntax in configuration files
    - Missing configuration file when explicitly specified with --config-file
    - Unknown keys in TOML configuration files
    - Configuration validation failures (non-HTTPS URL, invalid log level, timeouts)
    - File I/O errors when reading configuration files
"""

import argparse
import asyncio
import logging
import os
import signal
import sys
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from fastmcp import FastMCP

from habitica_mcp import __version__
from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.config import ServerConfig
from habitica_mcp.i18n import Localizer
from habitica_mcp.tools.dispatcher import ToolDispatcher
from habitica_mcp.tools.mcp_tools import build_dispatcher, register_tools

SERVER_NAME = "habitica-mcp-server"

MISSING_CREDENTIALS_MESSAGE = (
    "Error: Please set HABITICA_USER_ID and HABITICA_API_TOKEN environment variables"
)

# Environment variable -> configuration field
_ENV_FIELDS = {
    "HABITICA_USER_ID": "habitica_user_id",
    "HABITICA_API_TOKEN": "habitica_api_token",
}
_LANGUAGE_ENV_VARS = ("MCP_LANG", "LANG")


class CoreServer:
    """Main application runner responsible for initializing and managing the FastMCP server.

    This class handles FastMCP initialization, logging configuration to stderr,
    tool registration and server startup with stdio transport according to the
    MCP specification.
    """

    def __init__(self, config: ServerConfig) -> None:
        """Initialize the CoreServer instance.

        Args:
            config: Server configuration instance containing all settings.

        Raises:
            RegistryMismatchError: If a registered tool has no handler or vice versa.
        """
        self.config = config
        self._setup_logging()
        self.localizer = Localizer(config.language)
        self.app = self._create_fastmcp_instance()
        self._habitica_client: HabiticaClient | None = None
        self.dispatcher = self._register_tools()
        self._shutdown_requested = False
        self._sigint_count = 0
        self._setup_signal_handlers()

    def _setup_logging(self) -> None:
        """Configure logging to direct all output to stderr.

        This ensures that stdout remains clean for MCP JSON-RPC protocol communication
        while all logging output goes to stderr with proper formatting.
        """
        log_level = getattr(logging, self.config.log_level)
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            stream=sys.stderr,
        )

    def _create_fastmcp_instance(self) -> FastMCP:
        """Create and configure the FastMCP application instance.

        Returns:
            FastMCP: Configured FastMCP instance ready for stdio transport.
        """
        return FastMCP(
            name=SERVER_NAME,
            version=__version__,
        )

    def _register_tools(self) -> ToolDispatcher:
        """Build the tool dispatcher and register its tools with the FastMCP instance."""
        dispatcher = build_dispatcher(self.get_habitica_client(), self.localizer)
        register_tools(self.app, dispatcher)
        return dispatcher

    def _setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown.

        Handles SIGINT and SIGTERM to ensure clean shutdown without stdout corruption.
        """

        def signal_handler(signum: int, _: object | None) -> None:
            """Handle shutdown signals by forcing immediate exit."""
            logger = logging.getLogger(__name__)
            signal_name = "SIGINT" if signum == signal.SIGINT else f"Signal {signum}"

            if signum == signal.SIGINT:
                self._sigint_count += 1
                if self._sigint_count == 1:
                    logger.info("Received %s, initiating graceful shutdown", signal_name)
                    self._shutdown_requested = True
                    # FastMCP's stdio loop offers no clean stop hook
                    os._exit(0)
                else:
                    logger.warning("Second SIGINT received; forcing immediate exit")
                    os._exit(1)
            else:
                logger.info("Received %s, initiating graceful shutdown", signal_name)
                self._shutdown_requested = True
                os._exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def get_config(self) -> ServerConfig:
        """Get the server configuration instance for dependency injection.

        Returns:
            ServerConfig: The server configuration instance.
        """
        return self.config

    def get_habitica_client(self) -> HabiticaClient:
        """Get or create the Habitica API client instance for dependency injection.

        Returns:
            HabiticaClient: The Habitica API client instance.
        """
        if self._habitica_client is None:
            self._habitica_client = HabiticaClient(self.config)
        return self._habitica_client

    async def _test_connectivity_if_enabled(self) -> None:
        """Test Habitica API connectivity if enabled in configuration."""
        if not self.config.test_connectivity_on_startup:
            return

        logger = logging.getLogger(__name__)
        logger.info("Testing Habitica API connectivity...")

        try:
            habitica_client = self.get_habitica_client()
            async with habitica_client:
                success = await habitica_client.test_connectivity()
                if success:
                    logger.info("Habitica API connectivity test successful")
                else:
                    logger.warning("Habitica API connectivity test failed")
        except Exception:
            logger.exception("Habitica API connectivity test failed with exception")

    def run(self) -> None:
        """Run the MCP server with stdio transport.

        This method starts the FastMCP server and handles the main event loop
        for processing MCP protocol messages over stdio with proper shutdown handling.
        """
        logger = logging.getLogger(__name__)
        logger.info("Starting Habitica MCP server with stdio transport")

        if self.config.test_connectivity_on_startup:
            try:
                asyncio.run(self._test_connectivity_if_enabled())
            except Exception:
                logger.exception("Connectivity test failed during startup")
                # Don't exit - allow server to continue running

        try:
            self.app.run(transport="stdio")
        except KeyboardInterrupt:
            logger.info("Server shutdown requested via KeyboardInterrupt")
            raise
        except Exception:
            logger.exception("Unhandled exception in server run method")
            raise


def _get_known_config_fields() -> set[str]:
    """Get the set of known configuration field names.

    Returns:
        set[str]: Set of valid configuration field names for TOML validation.
    """
    return set(ServerConfig.model_fields)


def _load_config_from_file(config_file: str) -> dict[str, Any]:
    """Load configuration from TOML file with validation.

    Args:
        config_file: Path to the configuration file.

    Returns:
        dict[str, Any]: Configuration data loaded from file.

    Raises:
        SystemExit: On file parsing errors or unknown configuration keys.
    """
    config_data: dict[str, Any] = {}
    logger = logging.getLogger(__name__)
    config_path = Path(config_file)

    if config_path.exists():
        try:
            with config_path.open("rb") as f:
                file_config = tomllib.load(f)

            known_fields = _get_known_config_fields()
            unknown_keys = set(file_config.keys()) - known_fields
            if unknown_keys:
                logger.error(
                    "Unknown configuration keys in %s: %s",
                    config_path,
                    ", ".join(sorted(unknown_keys)),
                )
                sys.exit(1)

            config_data.update(file_config)
            logger.info("Loaded configuration from %s", config_path)
        except tomllib.TOMLDecodeError:
            logger.exception("Failed to parse TOML configuration file %s", config_path)
            sys.exit(1)
        except OSError:
            logger.exception("Failed to read configuration file %s", config_path)
            sys.exit(1)

    return config_data


def _apply_env_overrides(config_data: dict[str, Any]) -> None:
    """Apply Habitica credentials and display language from the environment.

    Args:
        config_data: Configuration data dictionary to modify.
    """
    for env_var, field in _ENV_FIELDS.items():
        value = os.environ.get(env_var)
        if value:
            config_data[field] = value

    for env_var in _LANGUAGE_ENV_VARS:
        value = os.environ.get(env_var)
        if value:
            config_data["language"] = value
            break


def _apply_cli_overrides(config_data: dict[str, Any], args: argparse.Namespace) -> None:
    """Apply CLI argument overrides to configuration data.

    Args:
        config_data: Configuration data dictionary to modify.
        args: Parsed command-line arguments.
    """
    if getattr(args, "log_level", None) is not None:
        config_data["log_level"] = args.log_level
    if getattr(args, "base_url", None) is not None:
        config_data["habitica_base_url"] = args.base_url
    if getattr(args, "user_id", None) is not None:
        config_data["habitica_user_id"] = args.user_id
    if getattr(args, "api_token", None) is not None:
        config_data["habitica_api_token"] = args.api_token
    if getattr(args, "language", None) is not None:
        config_data["language"] = args.language


def _require_credentials(config_data: dict[str, Any]) -> None:
    """Exit before any network activity when the Habitica credentials are absent.

    Raises:
        SystemExit: If the user ID or API token is missing or empty.
    """
    if not config_data.get("habitica_user_id") or not config_data.get("habitica_api_token"):
        logging.getLogger(__name__).error(MISSING_CREDENTIALS_MESSAGE)
        sys.exit(1)


def _create_validated_config(config_data: dict[str, Any]) -> ServerConfig:
    """Create and validate ServerConfig from configuration data.

    Args:
        config_data: Configuration data dictionary.

    Returns:
        ServerConfig: Validated configuration instance.

    Raises:
        SystemExit: On configuration validation errors.
    """
    logger = logging.getLogger(__name__)

    try:
        config = ServerConfig(**config_data)
    except Exception:
        logger.exception("Configuration validation failed")
        sys.exit(1)
    else:
        # Log effective configuration with secrets redacted
        logger.info("Effective configuration: %s", config.to_redacted_dict())
        return config


def load_configuration(args: argparse.Namespace) -> ServerConfig:
    """Load configuration from defaults, file, environment and CLI arguments.

    Precedence order (CLI > environment > file > defaults):
    1. Command-line arguments (highest priority)
    2. Environment variables (HABITICA_USER_ID, HABITICA_API_TOKEN, MCP_LANG / LANG)
    3. Configuration file values
    4. Default values (lowest priority)

    Args:
        args: Parsed command-line arguments.

    Returns:
        ServerConfig: Loaded and validated configuration.

    Raises:
        SystemExit: On missing credentials, configuration validation errors
            or file parsing errors.
    """
    logger = logging.getLogger(__name__)

    config_file = args.config_file or "./config.toml"

    # An explicitly requested config file must exist
    if args.config_file and not Path(config_file).exists():
        logger.error("Configuration file not found: %s", config_file)
        sys.exit(1)

    config_data = _load_config_from_file(config_file)
    _apply_env_overrides(config_data)
    _apply_cli_overrides(config_data, args)
    _require_credentials(config_data)

    config_data["config_file"] = config_file

    return _create_validated_config(config_data)


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for server configuration.

    Args:
        argv: Argument list to parse; defaults to ``sys.argv[1:]``.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Habitica MCP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config-file",
        type=str,
        help="Path to configuration file (default: ./config.toml)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )

    parser.add_argument(
        "--base-url",
        type=str,
        help="Override Habitica API base URL (e.g., https://habitica.com/api/v3)",
    )

    parser.add_argument(
        "--user-id",
        type=str,
        help="Override Habitica user ID (default: $HABITICA_USER_ID)",
    )

    parser.add_argument(
        "--api-token",
        type=str,
        help="Override Habitica API token (default: $HABITICA_API_TOKEN)",
    )

    parser.add_argument(
        "--language",
        type=str,
        help="Display language (default: $MCP_LANG, then $LANG, then en)",
    )

    return parser.parse_args(argv)


def main() -> None:
    """Main entry point for the Habitica MCP server.

    Loads a ``.env`` file if present, creates a CoreServer instance and runs the
    server with proper exception handling to ensure stdout remains uncorrupted
    for MCP protocol communication. All logging is directed to stderr.
    """
    logger = logging.getLogger(__name__)

    try:
        # Variables already set in the environment win over .env entries
        load_dotenv(override=False)

        args = parse_cli_args()
        config = load_configuration(args)

        server = CoreServer(config)
        server.run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested via KeyboardInterrupt")
        # Clean exit for keyboard interrupt - don't call sys.exit()
    except Exception:
        logger.exception("Unhandled exception in server")
        sys.exit(1)
    finally:
        logger.info("Server shutdown complete")


if __name__ == "__main__":
    main()
