from decision_bot.ai_core.intent.intent_classifier import IntentClassifier

__all__ = ["IntentClassifier"]
