from __future__ import annotations


class HttpCheckError(RuntimeError):
    pass


class ConfigError(HttpCheckError):
    pass


class DispatchError(HttpCheckError):
    pass


class VerdictError(HttpCheckError):
    pass


class ReadinessError(HttpCheckError):
    pass


class SinkError(HttpCheckError):
    pass
