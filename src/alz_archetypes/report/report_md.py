"""
src/alz_archetypes/report/report_md.py

Gerador canônico do relatório Markdown de uma resolução de archetype.

Regras:
- O relatório é derivado EXCLUSIVAMENTE do `ResolutionResult` (effective,
  errors, context).
- Não resolve, não valida, não consulta o Definition Library.
- Mesmo resultado => mesmo relatório (ordenação estável; timestamps dos
  eventos não são renderizados).

Estrutura mínima obrigatória:
# Archetype Report

## Summary
## Policy Definitions
## Policy Set Definitions
## Policy Assignments
## Role Definitions
## Role Assignments
## Errors
## Resolution Events
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List


REQUIRED_SECTIONS: List[str] = [
    "# Archetype Report",
    "## Summary",
    "## Policy Definitions",
    "## Policy Set Definitions",
    "## Policy Assignments",
    "## Role Definitions",
    "## Role Assignments",
    "## Errors",
    "## Resolution Events",
]


def _as_pretty_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, sort_keys=True, indent=2)


def _name_list(lines: List[str], names: Iterable[str], empty: str) -> None:
    names = list(names)
    if names:
        for n in names:
            lines.append(f"- `{n}`")
    else:
        lines.append(empty)
    lines.append("")


def generate_archetype_report(result: Any) -> str:
    """Gera o conteúdo completo do relatório a partir de um ResolutionResult."""
    if result is None:
        raise ValueError("ResolutionResult is required to generate the archetype report")

    effective = result.effective.to_dict() if result.effective is not None else None
    errors: List[Dict[str, Any]] = list(result.errors or [])
    ctx = result.context

    lines: List[str] = []
    lines.append("# Archetype Report\n")

    # Summary
    lines.append("## Summary")
    lines.append(f"- **Status**: `{'resolved' if effective is not None and not errors else 'failed'}`")
    if ctx is not None:
        lines.append(f"- **Archetype**: `{ctx.archetype}`")
        lines.append(f"- **Resolution ID**: `{ctx.resolution_id}`")
    if effective is not None:
        lines.append(f"- **Name**: `{effective['name']}`")
        lines.append(f"- **Parent ID**: `{effective['parent_id']}`")
        lines.append(f"- **Base Archetype**: `{effective['base_archetype']}`")
        if effective.get("display_name"):
            lines.append(f"- **Display Name**: {effective['display_name']}")
        subs = effective.get("subscription_ids") or []
        lines.append(f"- **Subscriptions**: `{len(subs)}`")
        for s in subs:
            lines.append(f"  - `{s}`")
    lines.append(f"- **Errors**: `{len(errors)}`")
    lines.append("")

    if effective is None:
        effective = {}

    lines.append("## Policy Definitions")
    _name_list(lines, effective.get("policy_definitions", []), "No policy definitions.")

    lines.append("## Policy Set Definitions")
    _name_list(lines, effective.get("policy_set_definitions", []), "No policy set definitions.")

    lines.append("## Policy Assignments")
    assignments = effective.get("policy_assignments") or {}
    if assignments:
        for key, spec in assignments.items():
            target = spec.get("policy_definition_name") or spec.get("policy_definition_id")
            lines.append(f"### {key}")
            lines.append(f"- **Display Name**: {spec.get('display_name')}")
            lines.append(f"- **Definition**: `{target}`")
            lines.append(f"- **Enforcement Mode**: `{spec.get('enforcement_mode')}`")
            if spec.get("identity"):
                lines.append(f"- **Identity**: `{spec['identity']}`")
            if spec.get("parameters"):
                lines.append("```json")
                lines.append(_as_pretty_json(spec["parameters"]))
                lines.append("```")
    else:
        lines.append("No policy assignments.")
    lines.append("")

    lines.append("## Role Definitions")
    _name_list(lines, effective.get("role_definitions", []), "No role definitions.")

    lines.append("## Role Assignments")
    roles = effective.get("role_assignments") or {}
    if roles:
        for key, spec in roles.items():
            lines.append(f"- **{key}**: `{spec.get('definition')}` → `{spec.get('object_id')}`")
    else:
        lines.append("No role assignments.")
    lines.append("")

    # Errors
    lines.append("## Errors")
    if errors:
        for err in errors:
            lines.append(f"- **{err.get('type')}**: {err.get('message')}")
            if err.get("hint"):
                lines.append(f"  - hint: {err['hint']}")
    else:
        lines.append("No errors.")
    lines.append("")

    # Resolution Events
    lines.append("## Resolution Events")
    events = list(ctx.events) if ctx is not None else []
    if events:
        for e in events:
            lines.append(f"- [{e.get('level')}] `{e.get('stage')}`: {e.get('message')}")
    else:
        lines.append("No events recorded.")

    content = "\n".join(lines)

    for sec in REQUIRED_SECTIONS:
        if sec not in content:
            raise RuntimeError(f"Report generation failed: missing required section: {sec}")

    return content
