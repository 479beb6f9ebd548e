"""
SGPA Calculator: course list + credit-weighted grade point average.
"""
