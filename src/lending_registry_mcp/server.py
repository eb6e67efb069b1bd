"""Lending Registry MCP Server - Core Server Implementation

Hosts the Lending Registry behind the Model Context Protocol. FastMCP takes
care of the transport, JSON-RPC framing and routing; this module wires the
registry's tools and resources into it and runs the process.

Exposed capabilities:
- Tools: add_book, issue_book, return_book, increment_book_copies,
  get_book_details, register_person
- Resources: library://books/list, library://books/{isbn}, library://loans/{isbn}

Lending state lives in memory for the lifetime of the process.
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP
from mcp.types import ToolAnnotations

from lending_registry_mcp.config import ServerConfig, get_config
from lending_registry_mcp.models import PersonId
from lending_registry_mcp.registry import LendingRegistry, get_registry
from lending_registry_mcp.resources import all_resources
from lending_registry_mcp.tools import all_tools

# Use stderr to keep stdout clean for stdio transport
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)

logger = logging.getLogger(__name__)


def seed_registry(registry: LendingRegistry, config: ServerConfig) -> int:
    """Register the configured seed people. Returns how many were added."""
    added = 0
    for person in config.seed_people:
        result = registry.register_person(PersonId(person.id), person.name)
        if result.ok:
            added += 1
        else:
            logger.warning("Skipping seed person %s: %s", person.id, result.message)
    return added


def create_server(config: ServerConfig) -> FastMCP:
    """Build the FastMCP server and register every tool and resource."""
    server = FastMCP(
        name=config.server_name,
        version=config.server_version,
        instructions=(
            "Lending Registry MCP Server - tracks books, people and which copies "
            "are checked out to whom. Use tools to add books, issue and return "
            "copies and register people; read resources to browse the catalog "
            "and the current loans."
        ),
    )

    for resource in all_resources:
        uri = resource.get("uri_template", resource.get("uri"))
        logger.debug("Registering resource: %s with URI: %s", resource["name"], uri)
        server.resource(
            uri=uri,
            name=resource["name"],
            description=resource["description"],
            mime_type=resource["mime_type"],
        )(resource["handler"])

    logger.info("Registered %d resources", len(all_resources))

    for tool in all_tools:
        logger.debug("Registering tool: %s", tool["name"])
        server.tool(
            name=tool["name"],
            description=tool["description"],
            annotations=ToolAnnotations(readOnlyHint=tool["read_only"]),
        )(tool["handler"])

    logger.info("Registered %d tools", len(all_tools))

    return server


# Load configuration
config = get_config()

mcp = create_server(config)

# =============================================================================
# TRANSPORT
# =============================================================================


def run_server() -> None:
    """Run the MCP server on the configured transport.

    stdio reads JSON-RPC from stdin and writes responses to stdout, so all
    logging goes to stderr. streamable_http listens on http_host:http_port.
    """
    logger.info(
        "Starting %s v%s on %s transport",
        config.server_name,
        config.server_version,
        config.transport,
    )

    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled - verbose protocol logging active")
    else:
        logging.getLogger().setLevel(config.log_level)
        logging.getLogger("fastmcp").setLevel(logging.WARNING)

    seeded = seed_registry(get_registry(), config)
    if seeded:
        logger.info("Registered %d seed people", seeded)

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, initiating shutdown...", signum)
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        logger.info("MCP Server ready and waiting for connections...")
        if config.transport == "stdio":
            mcp.run(transport="stdio")
        else:
            mcp.run(transport="streamable-http", host=config.http_host, port=config.http_port)
    except Exception:
        logger.exception("Fatal error in MCP server")
        sys.exit(1)


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================


def main() -> None:
    """Main entry point for the MCP server.

    Started via:
    - Command line: `python -m lending_registry_mcp.server`
    - Entry point: `lending-registry-mcp` (defined in pyproject.toml)
    """
    try:
        logger.info("=" * 60)
        logger.info("Lending Registry MCP Server")
        logger.info("Version: %s", config.server_version)
        logger.info("Transport: %s", config.transport)
        logger.info("Debug Mode: %s", config.debug)
        logger.info("=" * 60)

        run_server()

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Failed to start MCP server")
        sys.exit(1)


if __name__ == "__main__":
    main()
