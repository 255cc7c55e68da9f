"""
Tests for the error-handling application layer.

Covers:
- run_chain (ordering, short-circuit, sync and async hooks)
- emit_diagnostics (severity dispatch, trailing hint)
- FallbackRenderer (asset injection, client state, failure containment)
- HandleErrorUseCase (the full pipeline)
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from ssr_server.application.error_handling.diagnostics import (
    FALLBACK_AVAILABLE_HINT,
    FALLBACK_MISSING_HINT,
    emit_diagnostics,
)
from ssr_server.application.error_handling.handle_error import (
    HandleErrorUseCase,
    request_info_from,
)
from ssr_server.application.error_handling.hook_chain import run_chain
from ssr_server.application.error_handling.render_fallback import FallbackRenderer
from ssr_server.domain.http.entities import (
    Classification,
    LogLevel,
    RequestInfo,
    SerializedError,
)
from ssr_server.domain.http.errors import HttpError, NotFoundError, RedirectFoundError
from ssr_server.infrastructure.rendering.asset_manifest import StaticAssetManifest
from ssr_server.interfaces.http.reply import Reply

MANIFEST = {
    "publicPath": "/dist/",
    "entrypoints": {"rootErrorBoundary": {"assets": ["error.css", "error.js"]}},
}
PAGE = "<html><head><title>Oops</title></head><body>{message} at {path}</body></html>"


class _Component:
    """Fallback component rendering a fixed page."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls = []

    async def render(self, *, error, url):
        self.calls.append((error, url))
        if self.fail:
            raise RuntimeError("template exploded")
        return PAGE.format(message=error.message, path=url["pathname"])


def _request(url: str = "http://testserver/catalog/42?ref=mail") -> SimpleNamespace:
    return SimpleNamespace(
        client=SimpleNamespace(host="203.0.113.7"),
        headers={"x-request-id": "req-1"},
        url=url,
    )


def _use_case(log=None, fallback=None, manifest=None, before=None, after=None):
    log = log or MagicMock()
    renderer = FallbackRenderer(
        manifest_port=manifest or StaticAssetManifest(MANIFEST),
        log=log,
    )
    return HandleErrorUseCase(
        log=log,
        renderer=renderer,
        fallback=fallback,
        before_error=before,
        after_error=after,
    )


# =====================================================================
# run_chain
# =====================================================================

class TestRunChain:
    """Tests for the short-circuiting hook runner."""

    @pytest.mark.asyncio
    async def test_no_hooks_returns_none(self):
        assert await run_chain(None, RuntimeError(), None, None) is None
        assert await run_chain([], RuntimeError(), None, None) is None

    @pytest.mark.asyncio
    async def test_first_non_none_result_wins(self):
        calls = []

        def first(error, request, reply):
            calls.append("first")
            return None

        async def second(error, request, reply):
            calls.append("second")
            return "custom page"

        def third(error, request, reply):
            calls.append("third")
            return "never"

        result = await run_chain([first, second, third], RuntimeError(), None, None)

        assert result == "custom page"
        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_falsy_results_still_terminate(self):
        hook = MagicMock(return_value="")
        later = MagicMock(return_value="later")
        assert await run_chain([hook, later], RuntimeError(), None, None) == ""
        later.assert_not_called()

    @pytest.mark.asyncio
    async def test_hooks_receive_error_request_reply(self):
        hook = AsyncMock(return_value=None)
        error, request, reply = RuntimeError(), object(), object()
        await run_chain([hook], error, request, reply)
        hook.assert_awaited_once_with(error, request, reply)

    @pytest.mark.asyncio
    async def test_hook_exception_propagates(self):
        async def broken(error, request, reply):
            raise KeyError("hook bug")

        with pytest.raises(KeyError):
            await run_chain([broken], RuntimeError(), None, None)


# =====================================================================
# emit_diagnostics
# =====================================================================

class TestEmitDiagnostics:
    """Tests for diagnostic record emission."""

    INFO = RequestInfo(ip="1.2.3.4", request_id="r", url="/x")

    def test_logs_at_classified_level(self):
        log = MagicMock()
        error = RuntimeError("boom")
        classification = Classification(500, LogLevel.ERROR, "send-server-error", "Base")

        emit_diagnostics(log, classification, self.INFO, error, has_fallback=False)

        log.error.assert_called_once()
        log.info.assert_not_called()
        kwargs = log.error.call_args.kwargs
        assert kwargs["event"] == "send-server-error"
        assert kwargs["error"] is error
        assert kwargs["request_info"] is self.INFO
        assert kwargs["message"] == f"Base\n{FALLBACK_MISSING_HINT}"

    def test_mentions_fallback_when_available(self):
        log = MagicMock()
        classification = Classification(404, LogLevel.INFO, "not-found-error", "Base")

        emit_diagnostics(log, classification, self.INFO, NotFoundError(), has_fallback=True)

        message = log.info.call_args.kwargs["message"]
        assert message.endswith(FALLBACK_AVAILABLE_HINT)

    def test_warn_level_uses_warn(self):
        log = MagicMock()
        classification = Classification(500, LogLevel.WARN, "e", "m")
        emit_diagnostics(log, classification, self.INFO, RuntimeError(), has_fallback=False)
        log.warn.assert_called_once()


# =====================================================================
# FallbackRenderer
# =====================================================================

class TestFallbackRenderer:
    """Tests for error boundary rendering."""

    ERROR = SerializedError(status=503, message="Service <down>", stack="trace")

    @pytest.mark.asyncio
    async def test_injects_state_and_assets_before_head_close(self):
        log = MagicMock()
        renderer = FallbackRenderer(StaticAssetManifest(MANIFEST), log)

        rendered = await renderer.render(_Component(), self.ERROR, "http://testserver/a?b=1")

        assert rendered.body == rendered.markup.encode("utf-8")
        head, rest = rendered.markup.split("</head>", 1)
        assert "window.serverUrl = " in head
        assert 'window.serverError = new Error("Service \\u003Cdown\\u003E");' in head
        assert "Object.assign(window.serverError, " in head
        assert '<link data-chunk="rootErrorBoundary" rel="stylesheet" href="/dist/error.css">' in head
        assert '<script async data-chunk="rootErrorBoundary" src="/dist/error.js"></script>' in head
        assert head.index("window.serverUrl") < head.index("error.css") < head.index("error.js")
        assert "Service <down> at /a" in rest
        log.info.assert_called_once()
        assert log.info.call_args.kwargs["event"] == "render-fallback"

    @pytest.mark.asyncio
    async def test_component_receives_parsed_url(self):
        component = _Component()
        renderer = FallbackRenderer(StaticAssetManifest(MANIFEST), MagicMock())

        await renderer.render(component, self.ERROR, "http://testserver/a?b=1")

        error, url = component.calls[0]
        assert error is self.ERROR
        assert url["pathname"] == "/a"
        assert url["query"] == {"b": "1"}

    @pytest.mark.asyncio
    async def test_component_failure_is_contained(self):
        log = MagicMock()
        renderer = FallbackRenderer(StaticAssetManifest(MANIFEST), log)

        assert await renderer.render(_Component(fail=True), self.ERROR, "/a") is None

        log.warn.assert_called_once()
        kwargs = log.warn.call_args.kwargs
        assert kwargs["event"] == "failed-fallback-render"
        assert isinstance(kwargs["error"], RuntimeError)

    @pytest.mark.asyncio
    async def test_manifest_failure_is_contained(self):
        log = MagicMock()
        manifest = AsyncMock()
        manifest.fetch = AsyncMock(side_effect=FileNotFoundError("stats.json"))
        renderer = FallbackRenderer(manifest, log)

        assert await renderer.render(_Component(), self.ERROR, "/a") is None
        assert log.warn.call_args.kwargs["event"] == "failed-fallback-render"

    @pytest.mark.asyncio
    async def test_unencodable_markup_is_contained(self):
        log = MagicMock()
        renderer = FallbackRenderer(StaticAssetManifest(MANIFEST), log)
        error = SerializedError(status=404, message="x \udcff", stack="")

        assert await renderer.render(_Component(), error, "/a") is None
        assert isinstance(log.warn.call_args.kwargs["error"], UnicodeEncodeError)
        log.info.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_entrypoint_is_contained(self):
        log = MagicMock()
        renderer = FallbackRenderer(StaticAssetManifest({"entrypoints": {}}), log)

        assert await renderer.render(_Component(), self.ERROR, "/a") is None
        log.warn.assert_called_once()


# =====================================================================
# HandleErrorUseCase
# =====================================================================

class TestRequestInfo:
    """Tests for the request snapshot."""

    def test_snapshot_fields(self):
        info = request_info_from(_request())
        assert info == RequestInfo(
            ip="203.0.113.7",
            request_id="req-1",
            url="http://testserver/catalog/42?ref=mail",
        )

    def test_missing_client_and_header(self):
        request = SimpleNamespace(client=None, headers={}, url="/x")
        info = request_info_from(request)
        assert info.ip is None
        assert info.request_id is None


class TestRedirect:
    """Redirect errors bypass classification entirely."""

    @pytest.mark.asyncio
    async def test_redirect_with_default_status(self):
        log = MagicMock()
        after = MagicMock(return_value="after")
        component = _Component()
        reply = Reply()

        result = await _use_case(log, fallback=component, after=[after]).execute(
            RedirectFoundError("/login"), _request(), reply
        )

        assert result is None
        assert reply.status_code == 307
        assert reply.redirect_url == "/login"
        assert reply.headers["cache-control"] == "no-store, no-cache, must-revalidate"
        log.info.assert_called_once()
        assert log.info.call_args.kwargs["event"] == "redirect-found-error"
        log.error.assert_not_called()
        after.assert_not_called()
        assert component.calls == []

    @pytest.mark.asyncio
    async def test_redirect_with_declared_status(self):
        reply = Reply()
        await _use_case().execute(
            RedirectFoundError("https://example.com/", http_status=301), _request(), reply
        )
        assert reply.status_code == 301
        assert reply.redirect_url == "https://example.com/"


class TestBeforeHooks:
    """Before-error hooks may fully own the response."""

    @pytest.mark.asyncio
    async def test_before_result_short_circuits_everything(self):
        log = MagicMock()
        after = MagicMock(return_value="after")
        component = _Component()
        reply = Reply()
        sentinel = object()

        result = await _use_case(
            log, fallback=component, before=[lambda e, req, rep: sentinel], after=[after]
        ).execute(NotFoundError(), _request(), reply)

        assert result is sentinel
        assert log.method_calls == []
        after.assert_not_called()
        assert component.calls == []
        assert reply.status_code == 200

    @pytest.mark.asyncio
    async def test_before_result_wins_over_redirect(self):
        reply = Reply()
        result = await _use_case(before=[lambda e, req, rep: "mine"]).execute(
            RedirectFoundError("/login"), _request(), reply
        )
        assert result == "mine"
        assert reply.redirect_url is None

    @pytest.mark.asyncio
    async def test_hook_exception_propagates(self):
        async def broken(error, request, reply):
            raise LookupError("bad hook")

        with pytest.raises(LookupError):
            await _use_case(before=[broken]).execute(NotFoundError(), _request(), Reply())


class TestAfterHooks:
    """After-error hooks run once logging is done."""

    @pytest.mark.asyncio
    async def test_after_result_skips_fallback(self):
        log = MagicMock()
        component = _Component()
        reply = Reply()

        result = await _use_case(
            log, fallback=component, after=[AsyncMock(return_value={"custom": True})]
        ).execute(HttpError("down", http_status=503), _request(), reply)

        assert result == {"custom": True}
        log.error.assert_called_once()
        assert component.calls == []
        assert reply.status_code == 200

    @pytest.mark.asyncio
    async def test_after_hooks_see_logging_already_done(self):
        log = MagicMock()
        seen = []

        def after(error, request, reply):
            seen.append(log.info.call_count)

        with pytest.raises(NotFoundError):
            await _use_case(log, after=[after]).execute(NotFoundError(), _request(), Reply())
        assert seen == [1]


class TestRethrow:
    """Without an error page the original error is raised again."""

    @pytest.mark.asyncio
    async def test_not_found_without_fallback(self):
        log = MagicMock()
        reply = Reply()
        error = NotFoundError()

        with pytest.raises(NotFoundError) as exc_info:
            await _use_case(log).execute(error, _request(), reply)

        assert exc_info.value is error
        assert reply.status_code == 404
        log.info.assert_called_once()
        kwargs = log.info.call_args.kwargs
        assert kwargs["event"] == "not-found-error"
        assert kwargs["message"].endswith(FALLBACK_MISSING_HINT)
        assert "Content-Length" not in reply.headers

    @pytest.mark.asyncio
    async def test_failed_render_rethrows_original(self):
        log = MagicMock()
        error = ValueError("page crashed")

        with pytest.raises(ValueError) as exc_info:
            await _use_case(log, fallback=_Component(fail=True)).execute(
                error, _request(), Reply()
            )

        assert exc_info.value is error
        log.error.assert_called_once()
        log.warn.assert_called_once()
        assert log.warn.call_args.kwargs["event"] == "failed-fallback-render"
        assert [c[0] for c in log.method_calls] == ["error", "warn"]

    @pytest.mark.asyncio
    async def test_unencodable_message_rethrows_original(self):
        log = MagicMock()
        reply = Reply()
        error = NotFoundError("bad name \udcff")

        with pytest.raises(NotFoundError) as exc_info:
            await _use_case(log, fallback=_Component()).execute(error, _request(), reply)

        assert exc_info.value is error
        assert log.warn.call_args.kwargs["event"] == "failed-fallback-render"
        assert "Content-Length" not in reply.headers


class TestFallbackResponse:
    """A configured error boundary turns errors into HTML pages."""

    @pytest.mark.asyncio
    async def test_domain_503_renders_page(self):
        log = MagicMock()
        reply = Reply()

        body = await _use_case(log, fallback=_Component()).execute(
            HttpError("Maintenance in progress", http_status=503), _request(), reply
        )

        assert reply.status_code == 503
        page = body.decode("utf-8")
        assert "Maintenance in progress at /catalog/42" in page
        assert "http://testserver/catalog/42?ref=mail" in page
        assert reply.headers["Content-Type"] == "text/html; charset=utf-8"
        assert reply.headers["Content-Length"] == str(len(body))
        assert reply.headers["Cache-Control"] == "no-store, no-cache, must-revalidate"
        assert log.error.call_args.kwargs["event"] == "send-server-error"
        assert log.error.call_args.kwargs["message"].endswith(FALLBACK_AVAILABLE_HINT)
        assert log.info.call_args.kwargs["event"] == "render-fallback"

    @pytest.mark.asyncio
    async def test_content_length_counts_utf8_bytes(self):
        reply = Reply()
        body = await _use_case(fallback=_Component()).execute(
            NotFoundError("Страница не найдена — ошибка"), _request(), reply
        )
        assert int(reply.headers["Content-Length"]) == len(body)
        assert int(reply.headers["Content-Length"]) > len(body.decode("utf-8"))
        assert reply.status_code == 404
