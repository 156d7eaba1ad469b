"""GraphQL layer (strawberry) for the activity service."""
