# Notion integration module
from decision_bot.integrations.notion.client import NotionDecisionStore, DecisionStoreError

__all__ = ["NotionDecisionStore", "DecisionStoreError"]
