"""Formatos canônicos de identificadores (UUID, resource ids ARM).

Decisões:
- UUIDs devem estar na forma canônica minúscula com hífens; entradas em
  maiúsculas ou malformadas são rejeitadas, nunca normalizadas.
- Resource ids ARM são comparados sem diferenciar maiúsculas no namespace
  e no tipo do provider (comportamento da própria ARM).
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Pattern

UUID_RE = re.compile(r"^[0-9a-f]{8}-([0-9a-f]{4}-){3}[0-9a-f]{12}$")

IDENTITY_NAMESPACE = "Microsoft.ManagedIdentity"
IDENTITY_TYPE = "userAssignedIdentities"

WORKSPACE_NAMESPACE = "Microsoft.OperationalInsights"
WORKSPACE_TYPE = "workspaces"


def is_canonical_uuid(value: Any) -> bool:
    return isinstance(value, str) and UUID_RE.match(value) is not None


@lru_cache(maxsize=None)
def _resource_id_pattern(namespace: str, resource_type: str) -> Pattern[str]:
    return re.compile(
        r"^/subscriptions/[0-9a-f]{8}-(?:[0-9a-f]{4}-){3}[0-9a-f]{12}"
        r"/resourcegroups/[^/]+"
        rf"/providers/{re.escape(namespace)}/{re.escape(resource_type)}/[^/]+$",
        re.IGNORECASE,
    )


def is_arm_type_resource_id(value: Any, namespace: str, resource_type: str) -> bool:
    """Verifica se `value` é o resource id de um recurso `namespace/resource_type`."""
    if not isinstance(value, str):
        return False
    return _resource_id_pattern(namespace, resource_type).match(value) is not None


def is_user_assigned_identity_id(value: Any) -> bool:
    return is_arm_type_resource_id(value, IDENTITY_NAMESPACE, IDENTITY_TYPE)


def is_log_analytics_workspace_id(value: Any) -> bool:
    return is_arm_type_resource_id(value, WORKSPACE_NAMESPACE, WORKSPACE_TYPE)
