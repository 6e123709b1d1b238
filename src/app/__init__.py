"""App — coração do sistema: validação, submissão e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: tipos do domínio (payloads, erros de validação, status)
- coordinators/: upload de arquivos em duas fases
- use_cases/: orquestração da submissão
- services/: validadores, detector de spam e fachada do intake
- infra/: implementações concretas de IO (stores, notificadores, tasks)
- protocols/: contratos/interfaces
- observability/: correlation id e métricas via logs

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""
