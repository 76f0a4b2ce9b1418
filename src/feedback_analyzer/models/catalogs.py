"""
Closed vocabularies the classifier is allowed to answer with.

Both sets are rendered verbatim (comma-joined) into the product-detection
and issue-categorization prompts, and used again to filter the answers.
Tuples: read-only for the process lifetime, shared by all requests.
"""

PRODUCT_CATALOG: tuple[str, ...] = (
    "AI Gateway",
    "Browser Rendering",
    "Calls",
    "Cloudflare for Platforms",
    "Email Routing",
    "Hyperdrive",
    "KV",
    "WAF",
    "Pages Gateway",
    "Pub/Sub",
    "Pulumi",
    "Queues",
    "Magic Transit",
    "Bot Management",
    "Workers",
    "Pages",
    "R2",
    "D1",
    "Images",
    "Stream",
    "DNS",
    "SSL/TLS",
    "DDoS Protection",
    "Access",
    "Zero Trust",
    "Spectrum",
    "Load Balancing",
    "Durable Objects",
    "Tenant",
    "TURN Service",
    "Turnstile",
    "Vectorize",
    "Waiting Room",
    "Cloudflare Web Analytics",
    "Workers AI",
    "Workers Analytics Engine",
    "Workers for Platforms",
    "Workflows",
    "Zaraz",
)

ISSUE_TAXONOMY: tuple[str, ...] = (
    "Bug Report",
    "Feature Request",
    "Performance Issue",
    "Security Concern",
    "Documentation Need",
    "Integration Problem",
    "Configuration Help",
    "Billing Question",
    "Service Disruption",
    "API Issue",
    "General",
)

# Returned when the model answers outside ISSUE_TAXONOMY. Deliberately not
# "General": clients already key on this exact string.
FALLBACK_ISSUE_LABEL = "General Question"

# Model answer meaning "no product mentioned" (compared case-insensitively)
NO_PRODUCTS_ANSWER = "none"
