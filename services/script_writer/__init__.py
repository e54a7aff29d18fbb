"""Listing script writer.

Turns structured property details into a short narration script that reads
naturally when spoken by a voice service.
"""
