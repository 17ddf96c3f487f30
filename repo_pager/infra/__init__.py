"""Infrastructure: GraphQL transport, credentials, demo data and logging."""
