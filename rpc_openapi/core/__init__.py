"""共享内核: 异常定义."""
