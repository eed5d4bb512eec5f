# pyright: reportUnusedImport=false
from chord_sync.entities.chord_fetcher import ChordFetcher
