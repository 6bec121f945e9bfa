# CLI entry points: otbv-encode, otbv-decode, otbv-info
