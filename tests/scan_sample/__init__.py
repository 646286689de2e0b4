"""Tagged package used by the scanner tests"""

from .services.mail import Mailer  # re-export, must not be discovered twice
