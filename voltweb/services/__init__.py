# Service layer for the VoltServers site
# - api_client:     async httpx client for the site API (listings, status queries)
# - server_query:   upstream game server status lookup behind /api/query-server
# - status_poller:  concurrent status fan-out plus the per-view refresh timer
# - consent:        cookie-consent preferences on top of app.storage.user
