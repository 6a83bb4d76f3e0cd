"""HTTP API: routers, request schemas, dependencies and serializers."""
