# =============================================================================
# core/catalog.py  -  The Capability Catalog
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares the host operations that synthesized code is allowed to call.
#   Generated code reaches them as `ctx.env.SELF.<ID>(args)` inside the
#   execution capability; the catalog itself never executes anything.
#
# WHY A TUPLE OF FROZEN DATACLASSES:
#   The catalog is read by every request, concurrently, for the lifetime of
#   the process.  Making it immutable means no request can ever observe
#   another request's changes, and no locking is needed.
#
# WHERE THE OPERATIONS LIVE:
#   The todo store and its CRUD tools are external.  This module only
#   describes them so the prompt can teach the backend what exists.
# =============================================================================

from core.models import CapabilityDescriptor


CAPABILITY_CATALOG: tuple[CapabilityDescriptor, ...] = (
    CapabilityDescriptor(
        id="LIST_TODOS",
        signature="{}",
        description="List all todos",
    ),
    CapabilityDescriptor(
        id="GENERATE_TODO_WITH_AI",
        signature="{ prompt?: string }",
        description="Generate a todo with AI",
    ),
    CapabilityDescriptor(
        id="TOGGLE_TODO",
        signature="{ id: number }",
        description="Toggle a todo's completion",
    ),
    CapabilityDescriptor(
        id="DELETE_TODO",
        signature="{ id: number }",
        description="Delete a todo",
    ),
)

