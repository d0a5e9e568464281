# No tables. Images are stored in the images bucket (settings.images_bucket),
# or in S3 when AWS credentials are configured; rows keep the returned URL.
