"""Permissive CORS headers shared by the public routes."""

ALLOW_ANY_ORIGIN = {"Access-Control-Allow-Origin": "*"}

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "*",
    "Access-Control-Allow-Headers": "*",
}
