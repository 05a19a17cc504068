"""
Worker unit: redacts queued log envelopes and stores them per tenant
"""
