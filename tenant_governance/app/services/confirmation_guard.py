"""
Typed-confirmation gate for irreversible deletes.

Friction step, not a security boundary: the caller is already authorized.
"""

from typing import Optional

from tenant_governance.libs.result import Error, Result, Return

CONFIRMATION_TOKEN = "DELETE"


class ConfirmationGuard:
    """Stateless comparison of a supplied confirmation token"""

    @staticmethod
    def authorize(expected_token: str, supplied_token: Optional[str]) -> Result[None]:
        """
        Allow the destructive action only on an exact, case-sensitive match.

        Missing or non-string input is a mismatch, never an exception.

        Errors:
            - CONFIRMATION_MISMATCH: supplied token differs from expected_token
        """
        if isinstance(supplied_token, str) and (
            supplied_token.encode("utf-8") == expected_token.encode("utf-8")
        ):
            return Return.ok(None)

        return Return.err(
            Error(
                "CONFIRMATION_MISMATCH",
                f'Type "{expected_token}" to confirm this action',
            )
        )
