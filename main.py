# =============================================================================
# main.py  -  Entry Point for the Dynamic Tool Executor
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py                       # chat with the todo assistant
#   uv run python main.py --query "list todos"  # run the pipeline once, print JSON
#
# CHAT MODE:
#   1. Creates the Google ADK agent (agent/assistant.py)
#   2. The agent spawns tools/mcp_server.py over stdio
#   3. Each user message may trigger AI_TOOL_EXECUTOR calls, which
#      synthesize, validate, and run a one-off tool
#   4. The agent explains the outcome
#
# ONE-SHOT MODE:
#   Skips the chat layer and calls core/pipeline.py directly.  Useful for
#   checking what the generation backend produces for a given query.
#   Exit status is 0 for any envelope (even one carrying an execution
#   error) and 1 when no runnable tool could be generated.
# =============================================================================

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

# Load .env BEFORE anything reads model ids or API keys from the environment.
load_dotenv()

from core.config import Settings
from core.errors import ToolGenerationError


async def run_once(query: str) -> int:
    """Run the pipeline for a single query and print the envelope."""
    from tools.mcp_server import build_pipeline

    pipeline = build_pipeline(Settings.from_env())
    try:
        record = await pipeline.run(query)
    except ToolGenerationError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 1

    print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False, default=str))
    return 0


async def run_agent():
    """Run the todo assistant interactively."""
    from google.adk.runners import Runner
    from google.adk.sessions import InMemorySessionService
    from google.genai import types

    from agent.assistant import create_agent

    print("=" * 70)
    print("  DYNAMIC TOOL EXECUTOR")
    print("  Powered by Google ADK + LiteLLM + FastMCP")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    # InMemorySessionService keeps the conversation in RAM only.
    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name="dynamic_tool_executor",
        session_service=session_service,
    )
    session = await session_service.create_session(
        app_name="dynamic_tool_executor",
        user_id="demo_user",
    )

    print("✅ Agent initialized and ready!\n")
    print("💬 Tell the assistant what to do with your todos.")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        final_response = ""
        async for event in runner.run_async(
            user_id="demo_user",
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text
                    if getattr(part, "function_call", None):
                        print(f"  🔧 Calling tool: {part.function_call.name}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Synthesize and run one-off tools from plain language.")
    parser.add_argument("--query", help="run the pipeline once for this query and print the result")
    parser.add_argument("-v", "--verbose", action="store_true", help="log generated code and replies")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    if args.query:
        return asyncio.run(run_once(args.query))
    asyncio.run(run_agent())
    return 0


if __name__ == "__main__":
    sys.exit(main())
