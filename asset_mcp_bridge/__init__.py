"""Asset MCP Bridge.

A small web backend that lets a browser client talk to a remote
asset-management MCP server exposed over a split-channel SSE transport.

Core subpackages
----------------

- ``mcp_client``: the SSE transport, handshake and response correlation used
  to run one ``tools/list`` or ``tools/call`` per connection.
- ``workflows``: multi-step tool workflows such as folder cleanup.
- ``oauth``: exchange of authorization codes for access tokens.
- ``server``: the FastAPI application and its HTTP surface.
- ``core``: logging and optional Logfire monitoring.
"""

__version__ = "0.1.0"
