"""Unit tests: domain model, policies, aggregate, application layer and event bus."""
