from decision_bot.ai_core.summarization.thread_summarizer import ThreadSummarizer

__all__ = ["ThreadSummarizer"]
