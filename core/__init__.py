# =============================================================================
# core/__init__.py
# =============================================================================
# The tool-synthesis pipeline.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK, LiteLLM, or FastMCP.  The
#   generation backend and the execution capability are handed to
#   ToolSynthesisPipeline as plain objects, so every module here runs in a
#   bare Python REPL with fakes and no network.
# =============================================================================
