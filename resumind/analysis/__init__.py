from resumind.analysis.client_base import BaseAnalysisClient
from resumind.analysis.factory import AnalysisClientFactory
from resumind.analysis.prompt_loader import PromptBuilder

__all__ = ["AnalysisClientFactory", "BaseAnalysisClient", "PromptBuilder"]
