"""
pyquads
-------

Detection of stars in binary masks and construction of geometric quads for matching images against reference
catalogs.
"""
