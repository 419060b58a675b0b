"""
Endpoints da API v1.

Módulos disponíveis:
- agenda: Eventos e prazos
- auth: Usuário autenticado e token de desenvolvimento
- backup: Exportação, importação e integridade
- contexto: Contextos disponíveis e permissões
- dashboard: Estatísticas do painel
- documentos: Procurações e recibos
- equipes: Equipes, membros e convites
- financeiro: Receitas, despesas e resumo
- health: Health check
- pessoal: Advogados e funcionários
- processos: Processos do escritório
"""
