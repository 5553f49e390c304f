"""Constants and extension types shared by the test modules."""

from dataclasses import dataclass

from problemdetail.problem import ProblemExtension

OUT_OF_CREDIT = "https://example.com/probs/out-of-credit"
OUT_OF_CREDIT_TITLE = "You do not have enough credit."
OUT_OF_CREDIT_DETAIL = "Your current balance is 30, but that costs 50."
OUT_OF_CREDIT_INSTANCE = "/account/12345/abc"


@dataclass(eq=False)
class BalanceProblem(ProblemExtension):
    """Problem detail extended with a balance and the accounts to top up."""

    balance: int
    accounts: list[str]
