"""ALZ Archetypes: Resolver (core).

Merge de BaseArchetype + CustomizationSpec, integridade referencial contra o
Definition Library e substituição de defaults.
"""

from .defaults import substitute_defaults  # noqa: F401
from .hashing import compute_archetype_hash  # noqa: F401
from .resolver import ResolutionResult, Resolver  # noqa: F401
