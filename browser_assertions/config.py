from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal

CodegenLanguage = Literal["javascript", "python"]

CODEGEN_LANGUAGES: tuple[str, ...] = ("javascript", "python")

ENV_CODEGEN = "BROWSER_ASSERTIONS_CODEGEN"
ENV_CAPABILITIES = "BROWSER_ASSERTIONS_CAPS"
ENV_PAGE_STATE = "BROWSER_ASSERTIONS_PAGE_STATE"

_FALSY = {"0", "false", "no", "off"}


@dataclass
class AssertToolsConfig:
    # Language of the recorded trace lines
    codegen: CodegenLanguage = "javascript"

    # Calls to tools whose capability tag is not listed here are rejected
    capabilities: frozenset[str] = field(default_factory=lambda: frozenset({"core"}))

    # Append URL/title/snapshot of the page to rendered responses
    include_page_state: bool = True

    def __post_init__(self) -> None:
        if self.codegen not in CODEGEN_LANGUAGES:
            raise ValueError(
                f"Unsupported codegen language {self.codegen!r}; "
                f"expected one of {', '.join(CODEGEN_LANGUAGES)}"
            )
        self.capabilities = frozenset(self.capabilities)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> AssertToolsConfig:
        """
        Build a config from BROWSER_ASSERTIONS_* environment variables.

        Unset variables keep the dataclass defaults.
        """
        env = os.environ if environ is None else environ
        kwargs: dict = {}

        codegen = env.get(ENV_CODEGEN)
        if codegen:
            kwargs["codegen"] = codegen.strip().lower()

        caps = env.get(ENV_CAPABILITIES)
        if caps:
            kwargs["capabilities"] = frozenset(c.strip() for c in caps.split(",") if c.strip())

        page_state = env.get(ENV_PAGE_STATE)
        if page_state is not None and page_state != "":
            kwargs["include_page_state"] = page_state.strip().lower() not in _FALSY

        return cls(**kwargs)
