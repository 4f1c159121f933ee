"""Core building blocks for a Couchbase client: protocol codec, SCRAM, vbucket routing and retries."""

__version__ = "0.1.0"