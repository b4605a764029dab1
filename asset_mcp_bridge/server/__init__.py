"""
Asset MCP Bridge Server Package.

This package contains the web server that fronts the remote asset-management
MCP server for browser clients.

Subpackages:
    api: FastAPI route definitions (health, OAuth, tools, folders).
    core: Server settings.
    exception_handlers: Mapping of client errors to JSON responses.
    middleware: Request timing and logging.
    services: Shared invoker, OAuth client and workflow dependencies.
"""
