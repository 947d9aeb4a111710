"""TravelBook: look up and create Entra ID users through Microsoft Graph."""
