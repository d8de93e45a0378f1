"""
Amortization Errors

Input errors rejected at the configuration boundary. Both subclass
ValueError so callers that already catch ValueError keep working.
"""


class InvalidConfiguration(ValueError):
    """Loan configuration that cannot be amortized (non-positive principal or periods, negative rate)"""


class InvalidExtraPayment(ValueError):
    """Extra payment with a non-positive amount or a period outside the loan term"""
