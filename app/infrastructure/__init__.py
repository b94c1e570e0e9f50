"""Infrastructure modules for the command bot.

Centralized infrastructure components:
- commands: Command framework (tokenizer, argument binding, registry,
  guards, dispatcher)
"""
