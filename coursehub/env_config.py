"""Environment-based configuration settings"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Environment settings
ENVIRONMENT = os.getenv('ENVIRONMENT', 'development')

# Public URL of the site, used in auth confirmation emails
SITE_URLS = {
    'development': 'http://localhost:5000',
    'production': os.getenv('SITE_URL', 'http://localhost:5000')
}

SITE_URL = SITE_URLS.get(ENVIRONMENT, SITE_URLS['development'])

DEBUG = ENVIRONMENT == 'development'
