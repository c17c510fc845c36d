"""
Core services for the FitTrack Pro client.

Validation rules, record schemas, the REST client, request threading,
configuration, client-local storage and error handling. Nothing in here
builds widgets.
"""
