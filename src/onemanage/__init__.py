"""oneManage package.

Feature modules (tenants, departments, employees, tasks, notifications,
dashboard) each keep a thin Flask controller on top of a service that only
talks to repository protocols. Two persistence backends exist side by side:
a document store with one MongoDB document per tenant and a normalized MySQL
schema.
"""
