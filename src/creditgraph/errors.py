from __future__ import annotations


class CreditGraphError(Exception):
    pass


class InvalidGraphInput(CreditGraphError):
    pass


class ConvergenceError(CreditGraphError):
    def __init__(self, iterations: int, error: float) -> None:
        super().__init__(f"pagerank failed to converge after {iterations} iterations (error={error:.3e})")
        self.iterations = iterations
        self.error = error


class ConfigError(CreditGraphError):
    pass


class DatasetError(CreditGraphError):
    pass
