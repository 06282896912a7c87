"""ALZ Archetypes: modelo de dados (core).

Tipos imutáveis trocados entre Registry, Resolver e Validator, mais os
utilitários de materialização a partir de mapeamentos simples.
"""

from .parameters import (  # noqa: F401
    MAX_PARAMETER_DEPTH,
    ParameterStructureError,
    ParameterValue,
    decode_parameters,
    freeze_parameters,
    thaw_parameters,
)
from .parsing import (  # noqa: F401
    ModelParseError,
    parse_base_archetype,
    parse_customization,
    parse_defaults,
    parse_non_compliance_message,
    parse_policy_assignment,
    parse_role_assignment,
)
from .types import (  # noqa: F401
    BaseArchetype,
    CustomizationSpec,
    Defaults,
    EffectiveArchetype,
    EnforcementMode,
    IdentityType,
    NonComplianceMessage,
    PolicyAssignmentSpec,
    RoleAssignmentSpec,
)
