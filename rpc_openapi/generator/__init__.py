"""OpenAPI 片段生成器.

- paths: 路径模板解析与输入拆分
- parameters: path/query Parameter Object
- content: requestBody 与响应集合
- document: 完整文档组装
"""
