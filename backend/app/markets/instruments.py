"""Static instrument tables for the upstream providers."""

from __future__ import annotations

from types import MappingProxyType

# Altinkaynak code -> (canonical code, display name).
# "E"-prefixed codes are the legacy ("eski") mintings of the same coin.
GOLD_CODE_MAP: MappingProxyType[str, tuple[str, str]] = MappingProxyType({
    "C": ("C", "Çeyrek Altın"),
    "EC": ("C", "Çeyrek Altın"),
    "Y": ("Y", "Yarım Altın"),
    "EY": ("Y", "Yarım Altın"),
    "T": ("T", "Tam Altın"),
    "ET": ("T", "Tam Altın"),
    "A": ("A", "Ata Altın"),
    "A_T": ("A", "Ata Altın"),
    "R": ("R", "Reşat Altın"),
    "H": ("H", "Hamit Altın"),
    "GAT": ("GA", "Gram Altın"),
    "HH_T": ("HAS", "Has Altın"),
    "CH_T": ("KULCE", "Külçe Altın"),
    "B": ("22A", "22 Ayar Bilezik"),
    "AG_T": ("GUMUS", "Gümüş"),
    "18": ("18A", "18 Ayar Altın"),
    "14": ("14A", "14 Ayar Altın"),
    "G": ("GREMSE", "Gremse Altın"),
    "A5": ("A5", "Ata Beşli"),
})

# Currencies extracted from the Truncgil feed, in output order
CURRENCY_NAMES: MappingProxyType[str, str] = MappingProxyType({
    "USD": "Amerikan Doları",
    "EUR": "Euro",
    "GBP": "İngiliz Sterlini",
    "CHF": "İsviçre Frangı",
})

# Crypto base assets looked up as {BASE}USDT, in output order
CRYPTO_NAMES: MappingProxyType[str, str] = MappingProxyType({
    "BTC": "Bitcoin",
    "ETH": "Ethereum",
    "SOL": "Solana",
    "AVAX": "Avalanche",
    "LINK": "Chainlink",
    "DOT": "Polkadot",
    "ADA": "Cardano",
    "XRP": "Ripple",
    "DOGE": "Dogecoin",
    "SHIB": "Shiba Inu",
    "UNI": "Uniswap",
    "LTC": "Litecoin",
    "BNB": "BNB",
    "MATIC": "Polygon",
    "TRX": "Tron",
})

# Used when the exchange no longer lists the USDT/TRY pair
DEFAULT_USD_TRY_RATE = 34.0
