"""ALZ Archetypes: Validator (core).

Regras de campo e entre campos como funções puras sobre o modelo.
"""

from .formats import (  # noqa: F401
    is_arm_type_resource_id,
    is_canonical_uuid,
    is_log_analytics_workspace_id,
    is_user_assigned_identity_id,
)
from .validator import (  # noqa: F401
    validate_defaults,
    validate_policy_assignment,
    validate_role_assignment,
    validate_subscription_ids,
    validate_unique_lists,
)
