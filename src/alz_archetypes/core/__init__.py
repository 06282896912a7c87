# src/alz_archetypes/core/__init__.py
"""
Core do ALZ Archetypes.

Este pacote contém a implementação canônica do motor de resolução e
validação de archetypes, independente de qualquer transporte (RPC, CLI)
ou descrição declarativa de inputs.

Componentes principais:
    - config     → resolução de configuração (merge, validação estrutural, hashing)
    - model      → tipos imutáveis trocados entre os componentes
    - library    → Definition Library (catálogo de nomes, carga, snapshot)
    - registry   → Archetype Registry (nome → BaseArchetype)
    - validation → regras de campo e entre campos
    - resolver   → algoritmo de merge e agregação de erros
    - context    → eventos estruturados por resolução

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo desempate é explícito e testado
    - Nenhum estado mutável compartilhado entre resoluções
    - Erros são dados serializáveis e atribuíveis

Limites explícitos:
    - Não implanta policies em nenhum control plane
    - Não gerencia topologia de management groups
    - Não persiste estado
"""
