"""
Demand Compliance - FastAPI Application

Main entry point for the demand compliance backend.

Architecture:
- Letter text + ValidationContext → ComplianceValidator → ComplianceResult
- ValidationContext → Disclosure Generator → DisclosureBlocks
- ComplianceResult → Review Gate → ReviewGateDecision
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ALLOW_ORIGINS, LOG_LEVEL
from .routers import compliance_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title="Demand Compliance",
    description="""
    Demand Compliance - FDCPA Validation for Demand Letters

    Validates demand-letter text against FDCPA and state requirements and
    generates the disclosure blocks a letter must carry.

    ## Pipeline
    1. **Requirement Registry**: which rules apply to a context
    2. **Rule Checks**: pattern-based detection per requirement
    3. **Validator**: aggregates checks into a ComplianceResult
    4. **Disclosure Generator**: emits blocks that satisfy the same rules

    ## Key Principles
    - Validation is deterministic for a given text and context
    - A letter is compliant only when every required check passes
    - Generated disclosures always pass their own rules
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(compliance_router)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Demand Compliance",
        "version": "1.0.0",
        "description": "FDCPA Validation for Demand Letters",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


# For running with: python -m demand_compliance.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
