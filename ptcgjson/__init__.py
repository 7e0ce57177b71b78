"""
PTCGJSON, Pokemon TCG card & pricing JSON builder
MIT License
"""
