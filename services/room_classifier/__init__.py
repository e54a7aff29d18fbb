"""Room classification for listing photos.

Wraps an external vision provider and guarantees one classification per
photo, degrading to the "other" category when the provider fails.
"""
