"""
MariaDB 서비스 DB 공용 Declarative Base
- 모든 ORM 모델은 이 Base를 상속해 하나의 metadata를 공유한다
"""
from sqlalchemy.orm import declarative_base

MariaBase = declarative_base()
