"""
Sequential, short-circuiting runner for error hooks.

Used identically for the before-error and after-error chains.
"""

import inspect
from collections.abc import Sequence
from typing import Any, Optional

from ssr_server.domain.http.ports import ErrorHook


async def run_chain(
    hooks: Optional[Sequence[ErrorHook]],
    error: BaseException,
    request: Any,
    reply: Any,
) -> Any:
    """Run hooks in registration order until one returns a result.

    Each hook is awaited before the next one starts. Exceptions raised by
    a hook propagate to the caller.

    Args:
        hooks: Registered hooks, or None when nothing is registered.
        error: The caught error.
        request: The failed request.
        reply: The reply being built for the request.

    Returns:
        The first non-None hook result, or None.
    """
    if not hooks:
        return None

    for hook in hooks:
        result = hook(error, request, reply)
        if inspect.isawaitable(result):
            result = await result
        if result is not None:
            return result

    return None
