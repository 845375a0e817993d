from ecorater.extraction import UNAVAILABLE, extract, extract_identity, parse_rating

__all__ = ["UNAVAILABLE", "extract", "extract_identity", "parse_rating"]
