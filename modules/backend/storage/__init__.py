# Blob storage adapters
