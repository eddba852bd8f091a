from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from .auth.identity import IdentityProvider, RequestIdentityProvider
from .core.constants import DEFAULT_IDENTITY_HEADER
from .core.enums import StoreBackend
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection, MongoConfig, MongoConnection
from .departments.mongo_department_repository import MongoDepartmentRepository
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.repository import DepartmentRepository
from .departments.service import DepartmentService
from .employees.mongo_employee_repository import MongoEmployeeRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .employees.synchronizer import EmployeeSynchronizer
from .notifications.mailer import Mailer
from .notifications.mongo_feedback_repository import MongoFeedbackRepository
from .notifications.mysql_feedback_repository import MySQLFeedbackRepository
from .notifications.repository import FeedbackRepository
from .notifications.service import NotificationService
from .tasks.mongo_task_repository import MongoTaskRepository
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService
from .tenants.mongo_tenant_repository import MongoTenantRepository
from .tenants.mysql_tenant_repository import MySQLTenantRepository
from .tenants.repository import TenantRepository
from .tenants.service import TenantService


@dataclass(frozen=True)
class Container:
    conn: Optional[Union[MongoConnection, DatabaseConnection]]
    identity: IdentityProvider
    mailer: Mailer
    synchronizer: EmployeeSynchronizer

    tenants_repo: TenantRepository
    departments_repo: DepartmentRepository
    employees_repo: EmployeeRepository
    tasks_repo: TaskRepository
    feedback_repo: FeedbackRepository

    tenant_service: TenantService
    department_service: DepartmentService
    employee_service: EmployeeService
    task_service: TaskService
    notification_service: NotificationService
    dashboard_service: DashboardService


def assemble(
    *,
    identity: IdentityProvider,
    mailer: Mailer,
    synchronizer: EmployeeSynchronizer,
    tenants_repo: TenantRepository,
    departments_repo: DepartmentRepository,
    employees_repo: EmployeeRepository,
    tasks_repo: TaskRepository,
    feedback_repo: FeedbackRepository,
    public_base_url: str,
    business_mail: Optional[str],
    conn: Optional[Union[MongoConnection, DatabaseConnection]] = None,
) -> Container:
    """Wire services over already-built repositories (tests pass fakes here)."""
    tenant_service = TenantService(tenants_repo)
    return Container(
        conn=conn,
        identity=identity,
        mailer=mailer,
        synchronizer=synchronizer,
        tenants_repo=tenants_repo,
        departments_repo=departments_repo,
        employees_repo=employees_repo,
        tasks_repo=tasks_repo,
        feedback_repo=feedback_repo,
        tenant_service=tenant_service,
        department_service=DepartmentService(departments_repo, tenant_service),
        employee_service=EmployeeService(employees_repo, tenant_service),
        task_service=TaskService(tasks_repo, employees_repo, tenant_service),
        notification_service=NotificationService(
            mailer,
            tasks_repo,
            feedback_repo,
            tenant_service,
            public_base_url=public_base_url,
            business_mail=business_mail,
        ),
        dashboard_service=DashboardService(departments_repo, employees_repo, tasks_repo, tenant_service),
    )


def build_container(settings: Any, *, mailer: Mailer) -> Container:
    backend = StoreBackend(str(getattr(settings, "STORE_BACKEND", StoreBackend.MONGO.value)).lower())
    synchronizer = EmployeeSynchronizer(
        relocate_on_department_change=bool(getattr(settings, "RELOCATE_ON_DEPARTMENT_CHANGE", True)),
    )

    if backend is StoreBackend.MYSQL:
        db_config = getattr(settings, "DB_CONFIG")
        conn = DatabaseConnection.get_instance(
            DBConfig(
                host=str(db_config["host"]),
                port=int(db_config.get("port", 3306)),
                user=str(db_config["user"]),
                password=str(db_config["password"]),
                database=str(db_config["database"]),
            )
        )
        repos = dict(
            tenants_repo=MySQLTenantRepository(conn),
            departments_repo=MySQLDepartmentRepository(conn),
            employees_repo=MySQLEmployeeRepository(conn),
            tasks_repo=MySQLTaskRepository(conn),
            feedback_repo=MySQLFeedbackRepository(conn),
        )
    else:
        mongo_config = getattr(settings, "MONGO_CONFIG")
        conn = MongoConnection.get_instance(
            MongoConfig(uri=str(mongo_config["uri"]), database=str(mongo_config["database"]))
        )
        repos = dict(
            tenants_repo=MongoTenantRepository(conn),
            departments_repo=MongoDepartmentRepository(conn, synchronizer),
            employees_repo=MongoEmployeeRepository(conn, synchronizer),
            tasks_repo=MongoTaskRepository(conn),
            feedback_repo=MongoFeedbackRepository(conn),
        )

    return assemble(
        conn=conn,
        identity=RequestIdentityProvider(getattr(settings, "IDENTITY_HEADER", None) or DEFAULT_IDENTITY_HEADER),
        mailer=mailer,
        synchronizer=synchronizer,
        public_base_url=str(getattr(settings, "PUBLIC_BASE_URL", "")),
        business_mail=getattr(settings, "BUSINESS_MAIL", None) or None,
        **repos,
    )
