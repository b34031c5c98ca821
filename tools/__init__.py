# =============================================================================
# tools/__init__.py
# =============================================================================
# The MCP boundary, in both directions:
#
#   mcp_server.py     - what we EXPOSE (AI_TOOL_EXECUTOR, LIST_CAPABILITIES)
#   runner_client.py  - what we CONSUME (the remote run-tool operation that
#                       executes generated code in its own sandbox)
# =============================================================================
