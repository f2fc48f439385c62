"""Routers for the customer, agent and company resources."""
