"""Proxy de auditoria: webhooks do echo (Spinnaker) -> Google Cloud Logging.

Este pacote contém:
- constants: variáveis de ambiente e valores fixos do envelope
- config: configuração imutável carregada no start
- errors: exceções com status HTTP
- auth: verificação do header Basic enviado pelo echo
- utils: formatação de datas e helpers
- models: LogEntry e a visão do evento
- detection: tabela ordenada de regras e classificação do evento
- formatters: mensagens de auditoria por tipo de evento
- services: envio assíncrono ao Cloud Logging
- controller: criação do Flask app e endpoints
"""
