"""Adapters connecting the encoder to other logging front ends."""
