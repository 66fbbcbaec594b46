"""Services — use-case orchestration between HTTP adapter and repositories."""
