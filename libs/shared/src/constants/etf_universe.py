"""Sector / Thematic ETF Universe

Default ranking universe; their top holdings form the stock universe
"""

SECTOR_ETFS: tuple[str, ...] = (
    "ITA", "ROBO", "PEJ", "BLOK", "TAN", "CIBR", "IGV", "ARKG", "KWEB",
    "XLE", "SMH", "XLV", "XLF", "FDN", "XLY", "XLB", "UFO", "XRT", "XBI",
    "ITB", "MSOS", "IYT", "XLP", "IYZ", "NLR", "XME", "GDX", "JETS", "PBW",
)

# Number of ETFs whose holdings are pulled for the "holdings" universe
HOLDINGS_SOURCE_ETFS = 5
DEFAULT_MAX_HOLDINGS = 50
