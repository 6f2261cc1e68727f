"""
Shared kernel of the Daisy client: configuration, error taxonomy, logging,
helpers and the storage infrastructure used by every module.
"""
