"""API — adapters de borda para os serviços externos do intake.

Subpastas:
- connectors/intake/: clientes HTTP do endpoint de aplicações e do
  serviço de tickets de upload

NÃO PODE conter: FSM, regras de validação, orquestração de submissão.
"""
