# AI Core module

"""
AI Core Module - the language model capabilities behind the decision bot.

Key responsibilities:
- Intent classification (create / update / read / delete / summarize)
- Decision extraction from thread text
- Decision matching: duplicate comparison, relatedness, update target
- Thread summarization
"""
