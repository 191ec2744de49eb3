"""Services layer for SeagullsFM.

Services implement business logic and orchestrate data operations.
Organized by feature:
- identity: Login, tokens, password reset, accounts and staff
- content: Channel-owned records and their hosted media
- tracks: Listener track submissions, quota and approval
- notifications: E-mail templates
"""
