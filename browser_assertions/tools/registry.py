"""
Tool registry: declarative tool specs, input validation and dispatch.

A tool is a ToolSpec pairing a pydantic input model with an async handler.
The handler receives an explicit ToolContext and the validated input and
returns a ToolResult (trace lines plus a deferred check). `ToolRegistry.call`
runs the whole invocation and reports a ToolCallResult.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from playwright.async_api import Error as PlaywrightError
from pydantic import BaseModel

from ..codegen import LocatorGenerator, generate_locator, ref_locator
from ..config import AssertToolsConfig
from ..context import BrowserSession, SnapshotProvider, Tab
from ..errors import AssertionFailedError, ToolError, UnknownToolError, UnsupportedCapabilityError
from ..models import ToolCallResult, ToolResult
from ..tracing import Tracer

logger = logging.getLogger(__name__)

ToolType = Literal["readOnly", "destructive"]
ToolHandler = Callable[["ToolContext", Any], Awaitable[ToolResult]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: type[BaseModel]
    handler: ToolHandler | None = None
    title: str | None = None
    type: ToolType = "readOnly"
    capability: str = "core"

    @property
    def read_only(self) -> bool:
        return self.type == "readOnly"

    def llm_spec(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title or self.name,
            "description": self.description,
            "parameters": self.input_model.model_json_schema(),
            "annotations": {
                "title": self.title or self.name,
                "readOnlyHint": self.read_only,
                "destructiveHint": not self.read_only,
            },
        }


class ToolContext:
    """
    Everything a handler may touch, passed explicitly on each call.

    Attributes:
        session: open tabs of the client session
        config: codegen language, enabled capabilities, page-state rendering
        tracer: optional Tracer receiving one `tool_call` event per call
        step_id: step identifier stamped on trace events
        snapshot_provider: recaptures the page snapshot after a call
        locator_generator: turns a live locator into a trace expression
    """

    def __init__(
        self,
        session: BrowserSession,
        *,
        config: AssertToolsConfig | None = None,
        tracer: Tracer | None = None,
        step_id: str | None = None,
        snapshot_provider: SnapshotProvider | None = None,
        locator_generator: LocatorGenerator | None = None,
    ) -> None:
        self.session = session
        self.config = config or AssertToolsConfig()
        self.tracer = tracer
        self.step_id = step_id
        self.snapshot_provider = snapshot_provider
        self.locator_generator = locator_generator or generate_locator

    @property
    def language(self) -> str:
        return self.config.codegen

    def current_tab_or_die(self) -> Tab:
        return self.session.current_tab_or_die()

    async def generate_locator(self, locator: Any, ref: str) -> str:
        """
        Locator expression for the trace. Falls back to the ref selector when
        the element cannot be described, e.g. after it was detached.
        """
        try:
            return await self.locator_generator(locator, self.language)
        except PlaywrightError as e:
            logger.debug("could not describe element %s, tracing by ref: %s", ref, e)
            return ref_locator(ref, self.language)

    def can(self, capability: str) -> bool:
        return capability in self.config.capabilities

    def require(self, capability: str) -> None:
        if not self.can(capability):
            raise UnsupportedCapabilityError(capability)


class ToolRegistry:
    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def register(self, spec: ToolSpec) -> ToolSpec:
        if spec.name in self._tools:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._tools[spec.name] = spec
        return spec

    def tool(
        self,
        *,
        name: str,
        input_model: type[BaseModel],
        description: str,
        title: str | None = None,
        type: ToolType = "readOnly",  # noqa: A002
        capability: str = "core",
    ) -> Callable[[ToolHandler], ToolHandler]:
        def _decorator(fn: ToolHandler) -> ToolHandler:
            self.register(
                ToolSpec(
                    name=name,
                    title=title,
                    description=description,
                    input_model=input_model,
                    handler=fn,
                    type=type,
                    capability=capability,
                )
            )
            return fn

        return _decorator

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def list(self) -> list[ToolSpec]:
        return list(self._tools.values())

    def _spec_or_die(self, name: str) -> ToolSpec:
        spec = self._tools.get(name)
        if spec is None:
            raise UnknownToolError(name)
        return spec

    def validate_input(self, name: str, payload: Mapping[str, Any] | BaseModel) -> BaseModel:
        spec = self._spec_or_die(name)
        if isinstance(payload, spec.input_model):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump()
        return spec.input_model.model_validate(payload)

    def llm_tools(self) -> list[dict[str, Any]]:
        return [spec.llm_spec() for spec in self._tools.values()]

    async def execute(
        self, name: str, payload: Mapping[str, Any] | BaseModel, *, ctx: ToolContext
    ) -> ToolResult:
        """
        Validate input and run the handler. The deferred check is not run.

        Raises:
            UnknownToolError, UnsupportedCapabilityError, pydantic.ValidationError,
            or whatever precondition error the handler's collaborators raise.
        """
        spec = self._spec_or_die(name)
        ctx.require(spec.capability)
        params = self.validate_input(name, payload)
        if spec.handler is None:
            raise ToolError(f"Tool {name} has no handler")
        return await spec.handler(ctx, params)

    async def call(
        self, name: str, payload: Mapping[str, Any] | BaseModel, *, ctx: ToolContext
    ) -> ToolCallResult:
        """
        Run a full tool invocation: trace, live check, page state.

        Assertion failures are reported as `passed=False` with the message in
        `error`. Every other error propagates to the caller.
        """
        started = time.monotonic()
        try:
            result = await self.execute(name, payload, ctx=ctx)
        except Exception as e:
            self._emit(ctx, name, success=False, started=started, error=e)
            raise

        error: AssertionFailedError | None = None
        if result.action is not None:
            try:
                await result.action()
            except AssertionFailedError as e:
                error = e
            except Exception as e:
                self._emit(ctx, name, success=False, started=started, error=e)
                raise

        page_url = page_title = snapshot_text = None
        if result.capture_snapshot and ctx.config.include_page_state:
            tab = ctx.session.current_tab()
            if tab is not None:
                try:
                    if ctx.snapshot_provider is not None:
                        await tab.capture_snapshot(ctx.snapshot_provider)
                    page_url = tab.page.url
                    page_title = await tab.page.title()
                except Exception as e:
                    self._emit(ctx, name, success=False, started=started, error=e)
                    raise
                snapshot_text = tab.snapshot.text if tab.snapshot is not None else None

        duration_ms = self._emit(ctx, name, success=error is None, started=started, error=error)
        if error is None:
            logger.debug("%s passed in %dms", name, duration_ms)
        else:
            logger.info("%s failed: %s", name, error.message)

        return ToolCallResult(
            name=name,
            code=list(result.code),
            capture_snapshot=result.capture_snapshot,
            wait_for_network=result.wait_for_network,
            passed=error is None,
            error=error.message if error is not None else None,
            page_url=page_url,
            page_title=page_title,
            snapshot=snapshot_text,
            duration_ms=duration_ms,
            language=ctx.language,
        )

    @staticmethod
    def _emit(
        ctx: ToolContext,
        name: str,
        *,
        success: bool,
        started: float,
        error: BaseException | None = None,
    ) -> int:
        duration_ms = int((time.monotonic() - started) * 1000)
        if ctx.tracer is None:
            return duration_ms
        data: dict[str, Any] = {"tool": name, "success": success, "duration_ms": duration_ms}
        if error is not None:
            data["error"] = str(error)
            data["error_code"] = getattr(error, "error", type(error).__name__)
        ctx.tracer.emit("tool_call", data, step_id=ctx.step_id)
        return duration_ms
