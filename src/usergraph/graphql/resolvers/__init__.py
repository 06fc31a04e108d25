"""Resolver package for the GraphQL schema.

Resolvers take their storage handle from ``info.context["repository"]``;
they are defined in sibling modules.
"""
