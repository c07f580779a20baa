"""Schedule lookup, ticket intake and ticket listing services."""
