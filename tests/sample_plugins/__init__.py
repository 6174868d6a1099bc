"""Sample plugins used by the discovery and broadcast tests."""
