from __future__ import annotations

import os

ILL_CONDITIONED_ENV_VAR = "CACHEMATRIX_ILL_CONDITIONED"

RAISE = "raise"
WARN = "warn"
_POLICIES = (RAISE, WARN)


def _normalize_policy(value: str) -> str:
    policy = str(value).strip().lower()
    if policy not in _POLICIES:
        raise ValueError(
            f"Unknown ill-conditioned policy {value!r}; expected one of {', '.join(_POLICIES)}."
        )
    return policy


class Settings:
    def __init__(self, *, env_var: str = ILL_CONDITIONED_ENV_VAR) -> None:
        self._env_var = env_var
        self._ill_conditioned: str | None = None

    def ill_conditioned_policy(self) -> str:
        if self._ill_conditioned is not None:
            return self._ill_conditioned

        env = os.environ.get(self._env_var)
        self._ill_conditioned = _normalize_policy(env) if env else RAISE
        return self._ill_conditioned

    def set_ill_conditioned_policy(self, value: str | None) -> str:
        """Override the policy; ``None`` re-reads the environment on next use."""
        self._ill_conditioned = None if value is None else _normalize_policy(value)
        return self.ill_conditioned_policy()


_default_settings = Settings()


def default_settings() -> Settings:
    return _default_settings
