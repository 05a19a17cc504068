"""
HTTP intake unit: validates log submissions and enqueues them for processing
"""
