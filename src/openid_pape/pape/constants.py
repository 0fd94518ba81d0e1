"""
PAPE 1.0 Constants

Type URIs, field names and well-known policy and assurance level URIs
for the Provider Authentication Policy Extension.
"""

TYPE_URI = "http://specs.openid.net/extensions/pape/1.0"
VERSION = "1.0"

# Prefix of the fields declaring an alias for an assurance level type URI
AUTH_LEVEL_NAMESPACE_DECLARATION_PREFIX = "auth_level.ns."


class RequestParameters:
    """Field names of a PAPE request"""
    MAX_AUTH_AGE = "max_auth_age"
    PREFERRED_AUTH_POLICIES = "preferred_auth_policies"
    PREFERRED_AUTH_LEVEL_TYPES = "preferred_auth_level_types"


class AuthenticationPolicies:
    """Well-known authentication policy URIs"""
    PHISHING_RESISTANT = "http://schemas.openid.net/pape/policies/2007/06/phishing-resistant"
    MULTI_FACTOR = "http://schemas.openid.net/pape/policies/2007/06/multi-factor"
    PHYSICAL_MULTI_FACTOR = "http://schemas.openid.net/pape/policies/2007/06/multi-factor-physical"
    NONE = "http://schemas.openid.net/pape/policies/2007/06/none"


class AssuranceLevels:
    """Well-known assurance level type URIs and their reserved aliases"""
    NIST_TYPE_URI = "http://csrc.nist.gov/publications/nistpubs/800-63/SP800-63V1_0_2.pdf"

    PREFERRED_TYPE_URI_TO_ALIAS_MAP = {
        NIST_TYPE_URI: "nist",
    }
