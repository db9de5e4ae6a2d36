from verification.oracle import ChannelChecks, Mismatch, VerificationOracle, strip_html

__all__ = ["ChannelChecks", "Mismatch", "VerificationOracle", "strip_html"]
