"""Domain core: exceptions, authorization policy, status state machines and scheduling."""
