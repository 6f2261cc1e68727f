"""
Feature modules of the Daisy client.

- accounts: sign-in, registration and sessions
- blog: blog documents and keyword search
- recognition: remote plant recognition and result parsing
"""
