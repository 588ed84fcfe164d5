"""
Infrastructure layer: socket client, configuration and logging.
"""
