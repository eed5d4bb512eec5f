import logging

logger = logging.getLogger("llm_clients")
