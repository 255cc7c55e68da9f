"""
Diagnostic record emission for classified errors.
"""

from ssr_server.domain.http.entities import Classification, LogLevel, RequestInfo
from ssr_server.domain.http.ports import LoggerPort

FALLBACK_AVAILABLE_HINT = "Root error boundary will be rendered for the client"
FALLBACK_MISSING_HINT = (
    "You can add a root error boundary template for better UX "
    "(ERROR_BOUNDARY_TEMPLATE setting)"
)


def emit_diagnostics(
    logger: LoggerPort,
    classification: Classification,
    request_info: RequestInfo,
    error: BaseException,
    has_fallback: bool,
) -> None:
    """Log one structured record at the classified severity."""
    hint = FALLBACK_AVAILABLE_HINT if has_fallback else FALLBACK_MISSING_HINT
    message = f"{classification.log_message}\n{hint}"

    log_method = {
        LogLevel.INFO: logger.info,
        LogLevel.WARN: logger.warn,
        LogLevel.ERROR: logger.error,
    }[classification.log_level]

    log_method(
        event=classification.log_event,
        message=message,
        error=error,
        request_info=request_info,
    )
