"""Core engine: data, simulation values, events, input and rendering contracts."""
