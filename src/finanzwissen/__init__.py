"""FinanzWissen: gamified personal-finance learning API."""
