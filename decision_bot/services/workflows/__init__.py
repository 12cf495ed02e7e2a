from decision_bot.services.workflows.base import Workflow, Notifier
from decision_bot.services.workflows.create import CreateWorkflow
from decision_bot.services.workflows.update import UpdateWorkflow
from decision_bot.services.workflows.delete import DeleteWorkflow
from decision_bot.services.workflows.read import ReadWorkflow, SummarizeWorkflow

__all__ = [
    "Workflow",
    "Notifier",
    "CreateWorkflow",
    "UpdateWorkflow",
    "DeleteWorkflow",
    "ReadWorkflow",
    "SummarizeWorkflow",
]
