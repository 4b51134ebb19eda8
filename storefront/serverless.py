"""
Point d'entrée serverless (Vercel / AWS Lambda)
"""
from mangum import Mangum

from storefront.main import app

handler = Mangum(app)
