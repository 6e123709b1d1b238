"""Connectors — clientes HTTP de serviços externos.

Estrutura:
- intake/: endpoint de aplicações e tickets de upload (httpx)
"""

__all__: list[str] = []
