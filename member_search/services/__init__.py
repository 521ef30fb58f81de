"""서비스 패키지 (비즈니스 로직 계층).

Service package: Business logic layer between routers and repositories.
"""
