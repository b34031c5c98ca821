# =============================================================================
# agent/__init__.py
# =============================================================================
# Everything here talks to a language model:
#
#   generation.py  - the Generation Client used by the pipeline (litellm)
#   assistant.py   - the Google ADK chat front end
#   prompt.py      - the chat front end's system prompt
#
# The pipeline itself (core/) never imports from this package; it receives a
# generation client through its constructor.
# =============================================================================
