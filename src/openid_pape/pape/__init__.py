"""
Provider Authentication Policy Extension (PAPE) 1.0

Request-side support: the RP asks the OP for authentication policies,
assurance levels and a maximum authentication age.
"""

from .constants import (
    AUTH_LEVEL_NAMESPACE_DECLARATION_PREFIX,
    TYPE_URI,
    AssuranceLevels,
    AuthenticationPolicies,
    RequestParameters,
)
from .policy_request import (
    PolicyRequest,
    create_policy_request,
    from_wire,
    register,
    to_wire,
)

__all__ = [
    "AUTH_LEVEL_NAMESPACE_DECLARATION_PREFIX",
    "TYPE_URI",
    "AssuranceLevels",
    "AuthenticationPolicies",
    "RequestParameters",
    "PolicyRequest",
    "create_policy_request",
    "from_wire",
    "register",
    "to_wire",
]
