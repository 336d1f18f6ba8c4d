from woodpuzzle.engine.positioncode.codec import DecodeResult, Illegality, classify, decode, encode

__all__ = ["DecodeResult", "Illegality", "classify", "decode", "encode"]
