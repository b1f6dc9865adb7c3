"""Default Solana-ecosystem asset universe.

SOL is the benchmark and JITOSOL the single liquid-staking token.  All
entries carry passing compliance attestations; curation of those flags
happens outside the engine.
"""

from __future__ import annotations

from src.domain.models.assets import AssetDefinition, AssetUniverse
from src.domain.models.enums import AssetCategory

_C = AssetCategory

# (symbol, name, coingecko_id, category, contract_address)
_DEFAULT_ROWS: list[tuple[str, str, str, AssetCategory, str]] = [
    ("SOL", "Solana", "solana", _C.L1, ""),
    ("PUMP", "Pump.fun", "pump-fun", _C.MEME, "pumpCmXqMfrsAkQ5r49WcJnRayYRqmXz6ae8H7H9Dfn"),
    ("JITOSOL", "Jito Staked SOL", "jito-staked-sol", _C.LST, "J1toso1uCk3RLmjorhTtrVwY9HJ7X8V9yYac6Y7kGCPn"),
    ("TRUMP", "Official Trump", "official-trump", _C.MEME, "6p6xgHyF7AeE6TZkSmFsko444wqoP15icUSqi2jfGiPN"),
    ("RENDER", "Render", "render-token", _C.DEPIN, "rndrizKT3MK1iimdxRdWabcF7Zg7AR5T4nud4EkHBof"),
    ("JUP", "Jupiter", "jupiter-exchange-solana", _C.DEFI, "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN"),
    ("BONK", "Bonk", "bonk", _C.MEME, "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"),
    ("PENGU", "Pudgy Penguins", "pudgy-penguins", _C.NFT, "2zMMhcVQEXDtdE6vsFS7S7D5oUodfJHE8vd1gnBouauv"),
    ("PYTH", "Pyth Network", "pyth-network", _C.INFRA, "HZ1JovNiVvGrGNiiYvEozEVgZ58xaU3RKwX8eACQBCt3"),
    ("WIF", "dogwifhat", "dogwifcoin", _C.MEME, "EKpQGSJtjMFqKZ9KQanSqYXRcF8fBopzLHYxdM65zcjm"),
    ("HNT", "Helium", "helium", _C.DEPIN, "hntyVP6YFm1Hg25TN9WGLqM12b8TQmcknKrdu1oxWux"),
    ("RAY", "Raydium", "raydium", _C.DEFI, "4k3Dyjzvzp8eMZWUXbBCjEvwSkkk59S5iCNLY3QrkX6R"),
    ("ZBCN", "Zebec Network", "zebec-network", _C.DEFI, "ZBCNpuD7YMXzTHB2fhGkGi78MNsHGLRXUhRewNRm9RU"),
    ("W", "Wormhole", "wormhole", _C.INFRA, "85VBFQZC9TZkfaptBWjvUw7YbZjy52A6mjtPGjstQAmQ"),
    ("JTO", "Jito", "jito-governance-token", _C.DEFI, "jtojtomepa8beP8AuQc6eXt5FriJwfFMwQx2v2f9mCL"),
    ("FARTCOIN", "Fartcoin", "fartcoin", _C.MEME, "9BB6NFEcjBCtnNLFko2FqVQBq8HHM13kCyYcdQbgpump"),
    ("SAROS", "Saros", "saros-finance", _C.DEFI, "SarosY6Vscao718M4A778z4CGtvcwcGef5M9MEH1LGL"),
    ("GRASS", "Grass", "grass", _C.AI, "Grass7B4RdKfBCjTKgSqnXkqjwiGvQyFbuSCUJr3XXjs"),
    ("MEW", "cat in a dogs world", "cat-in-a-dogs-world", _C.MEME, "MEW1gQWJ3nEXg2qgERiKu7FAFj79PHvQVREQUzScPP5"),
    ("POPCAT", "Popcat", "popcat", _C.MEME, "7GCihgDB8fe6KNjn2MYtkzZcRjQy3t9GHdC8uHYmW2hr"),
    ("DRIFT", "Drift", "drift-protocol", _C.DEFI, "DriFtupJYLTosbwoN8koMbEYSx54aFAVLddWsbksjwg7"),
    ("PNUT", "Peanut the Squirrel", "peanut-the-squirrel", _C.MEME, "2qEHjDLDLbuBgRYvsxhc5D6uDWAivNFZGan56P1tpump"),
    ("ORCA", "Orca", "orca", _C.DEFI, "orcaEKTdK7LKz57vaAYr9QeNsVEPfiu6QeMU1kektZE"),
    ("BOME", "Book of Meme", "book-of-meme", _C.MEME, "ukHH6c7mMyiWCf1b9pnWe25TSpkDDt3H5pQZgZ74J82"),
    ("KMNO", "Kamino", "kamino", _C.DEFI, "KMNo3nJsBXfcpJTVhZcXLW7RmTwTt4GVFE7suUBo9sS"),
    ("MET", "Meteora", "meteora", _C.DEFI, "METvsvVRapdj9cFLzq4Tr43xK4tAjQfwX76z3n6mWQL"),
]

DEFAULT_UNIVERSE = AssetUniverse.of(
    AssetDefinition(
        symbol=symbol,
        name=name,
        coingecko_id=coingecko_id,
        is_native=True,
        category=category,
        contract_address=contract_address,
    )
    for symbol, name, coingecko_id, category, contract_address in _DEFAULT_ROWS
)
