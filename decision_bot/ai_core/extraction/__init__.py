from decision_bot.ai_core.extraction.decision_extractor import DecisionExtractor

__all__ = ["DecisionExtractor"]
