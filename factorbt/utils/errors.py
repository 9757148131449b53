# factorbt/utils/errors.py


class FactorBacktestError(RuntimeError):
    """factorbt 所有异常的根类型。"""


class ContractViolation(FactorBacktestError):
    """
    Raised when a query's inputs break the data contract
    (incomplete panel, bad quantile bounds, unknown factor, ...).

    Fatal for the query only: the Panel is never touched,
    so the caller may retry with corrected parameters.
    Should NOT print traceback in the CLI.
    """
