"""
Job Board Backend.

Core components:
- resources: Controllers for jobs, sarkari jobs, internships, certifications, walk-ins, subscriptions
- services: Listing pipeline, partition relocation, CV analysis
- agents: CV scorer
- tools: Logo lookup, PDF parser, S3 blob store, CSV/XLSX rows
- db: Document store over SQLAlchemy
"""
