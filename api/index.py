"""
Vercel entry point for the Helpdesk Assistant API
"""
import os

# Serverless deployments read requests from Supabase
os.environ.setdefault("ENVIRONMENT", "production")
os.environ.setdefault("REQUEST_STORE_BACKEND", "supabase")

from mangum import Mangum

from helpdesk.main import app

# Lambda handler for the ASGI app; lifespan "auto" builds the services on cold start
handler = Mangum(app, lifespan="auto")
